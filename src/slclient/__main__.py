"""
Run with: python -m slclient
"""
import sys

from slclient.main import main

if __name__ == "__main__":
    sys.exit(main())
