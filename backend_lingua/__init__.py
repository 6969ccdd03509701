"""
Backend Lingua — API backend for a wallet-authenticated language-exchange mini-app.

Users onboard with name, location and languages, search for exchange partners,
record contacts when a chat is started and rate past partners. Modular
architecture: config, logging, database, services and API server.
"""

__version__ = "0.1.0"
