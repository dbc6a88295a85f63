# src/assetwatch/__main__.py
from assetwatch.app import main

main()
