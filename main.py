#!/usr/bin/env python3
"""
lottocore command line entry point.

Usage:
    python main.py profiles
    python main.py generate --type mega_sena --count 5 --preset --seed 7
    python main.py check --type quina --numbers 4,8,15,16,23 --records data/quina.json
    python main.py stats --type lotofacil --records data/lotofacil.json --last 100
"""
import sys

from lottocore.cli import main

if __name__ == "__main__":
    sys.exit(main())
