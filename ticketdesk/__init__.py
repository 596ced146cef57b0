"""Ticketdesk - Streamlit admin client for the ticketing REST API."""

__version__ = "0.1.0"
