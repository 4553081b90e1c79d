"""Standarium ERP: inventory, sales and services dashboard on Dash + Supabase."""

__version__ = "1.0.0"
