"""Core of SnackPDF: page range handling and Ghostscript orchestration."""
