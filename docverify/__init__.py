"""
Loan Application Document Verification

This package contains the pipeline that verifies documents uploaded for a
loan application:
- Text extraction using Tesseract OCR
- Document classification using an OpenAI model
- Heuristic scoring of the model's analysis
- Upload slot tracking and final application submission
"""

__version__ = "1.0.0"
