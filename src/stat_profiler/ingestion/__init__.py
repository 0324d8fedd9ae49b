"""Tabular data ingestion."""

from .csv_loader import load_csv, load_dataset, profile_csv

__all__ = ['load_csv', 'load_dataset', 'profile_csv']
