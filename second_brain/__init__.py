"""
SecondBrain: personal notes and PDFs answered by retrieval-augmented generation.
"""

__version__ = "0.1.0"
