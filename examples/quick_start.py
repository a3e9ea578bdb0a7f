#!/usr/bin/env python3
# Example usage of paradox_db_reader
# Usage: python examples/quick_start.py path/to/StdItems.DB [column]

import sys

from paradox_db_reader import Table
from paradox_db_reader.console import print_dataset, progress_printer


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: quick_start.py FILE.DB [column]", file=sys.stderr)
        sys.exit(2)

    # Decode header, schema and every data block up front
    table = Table(sys.argv[1], on_progress=progress_printer)
    print(repr(table))

    # Column layout
    for col in table.describe():
        print(f"  {col['name']:20} {col['type']:10} {col['size']}")

    if len(sys.argv) > 2:
        # One column across all blocks
        print(table.column(sys.argv[2]))
    else:
        print_dataset(table, limit=20)


if __name__ == "__main__":
    main()
