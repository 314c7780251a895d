"""Output generation for rosters and portals (text, PDF)."""

from socroster.output.pdf_generator import RosterPDFGenerator
from socroster.output.text_report import TextReportGenerator

__all__ = [
    "RosterPDFGenerator",
    "TextReportGenerator",
]
