#!/usr/bin/env python
"""Development server entrypoint for Pennywise."""

from pennywise import create_app

if __name__ == "__main__":
    create_app("development").run(debug=True)
