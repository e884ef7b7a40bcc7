#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vault_orders.config.loader import ConfigLoader
from vault_orders.config.validation import ConfigValidator, ValidationError
from vault_orders.errors import ConfigurationError


def validate_network(loader: ConfigLoader, network: str) -> List[ValidationError]:
    """Validate parameters and the address table of one network."""
    config = loader.merge_config()
    config["addresses"] = loader.merge_addresses(network)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating vault orders configuration...")

    loader = ConfigLoader.create()
    networks = sys.argv[1:] or [loader.defaults.network.network]

    all_valid = True

    for network in networks:
        print(f"\nValidating {network}...")

        errors = validate_network(loader, network)
        if errors:
            print(f"Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
            continue

        try:
            book = loader.load_address_book(network)
        except ConfigurationError as e:
            print(f"Cannot build address book: {e}")
            all_valid = False
            continue

        unset = [role for role, address in book.roles.items() if not address]
        print(f"OK: {len(book.roles)} roles, {len(book.tokens)} tokens")
        if unset:
            print(f"  not deployed: {', '.join(unset)}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
