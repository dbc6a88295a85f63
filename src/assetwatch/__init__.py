# src/assetwatch/__init__.py
"""
AssetWatch - Gold, Dollar and Euro Investment Tracker

Records purchases of gold, US dollars and euros with the rate fixed at
purchase time, and values them against live market rates with a shared
TTL cache, profit/loss calculation and a cancelable refresh loop.
"""

__version__ = "1.0.0"
__author__ = "Masih Sadri"
