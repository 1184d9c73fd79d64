"""
Career Hub
Job-board backend: company reviews, job application tracking and
account settings over MongoDB.
"""

__version__ = "1.0.0"
