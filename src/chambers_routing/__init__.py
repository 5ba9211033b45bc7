"""Chambers Routing: enquiry routing for barristers' chambers."""

__version__ = "0.1.0"
