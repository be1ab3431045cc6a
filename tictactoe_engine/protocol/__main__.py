"""
Main entry point for running the engine's text protocol.

Usage:
    python -m tictactoe_engine.protocol
"""

from tictactoe_engine.protocol.interface import main

if __name__ == "__main__":
    main()
