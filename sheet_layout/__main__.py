# sheet_layout/__main__.py
# Package entrypoint so you can run:
#   python -m sheet_layout --help
#
# Examples:
#   python -m sheet_layout --products products.csv --sheet 700x500
#   python -m sheet_layout --products job.json --out out/ --png layout.png

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
