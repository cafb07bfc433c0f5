"""Entry point: python -m swagger2angular

Reads a Swagger document, generates models/ and resources/ under the
output path.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
