"""PdfHelper - HTML to PDF generation service."""

__version__ = "1.0.0"
