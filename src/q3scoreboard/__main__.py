"""
q3scoreboard CLI Entry Point

Allows running the package as a module: python -m q3scoreboard
"""

from q3scoreboard.cli import main

if __name__ == "__main__":
    main()
