"""CONNEKS cable schedule editor.

Spreadsheet-style editing of cable/wire records with undo/redo, spreadsheet
import/export, and label batch layout for sheet and roll label stock.
"""

__version__ = "0.3.0"
