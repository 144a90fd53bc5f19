"""PDF extraction boundary."""

from rag_engine.boundary.pdf.pdf_extractor import PdfExtractor

__all__ = ["PdfExtractor"]
