"""
Onion CLI - Command-line interface for onion_layers.

Builds an onion from a YAML scene (or the built-in sample) and answers
"points above line" queries, printing JSON.

Usage:
    onion-cli --sample build
    onion-cli --config config/onion.yaml build
    onion-cli --sample query
    onion-cli --config config/onion.yaml query --line 0 0 600 600
"""

__version__ = "1.0.0"
