"""
Command-line tools for the Iconik client.
"""
