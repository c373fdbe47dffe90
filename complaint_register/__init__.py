"""
Complaint Register - log, import and track farmer/dealer service complaints
"""
__version__ = "1.0.0"
