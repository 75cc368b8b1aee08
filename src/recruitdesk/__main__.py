"""
Module entry point for running recruit-desk as a Python module.

Usage:
    python -m recruitdesk monitor                 # Run the interview monitor service
    python -m recruitdesk check                   # One check, print alerts
    python -m recruitdesk today                   # Today's interviews
    python -m recruitdesk candidates --search ja  # Prefix search
    python -m recruitdesk email 42                # Send the email the status calls for
"""

from recruitdesk.cli import main

if __name__ == "__main__":
    main()
