"""
Serving — FastAPI application for PDF upload and question answering.
"""
