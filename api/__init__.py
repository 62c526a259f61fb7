"""
API routers for the PDF Research Assistant
"""
