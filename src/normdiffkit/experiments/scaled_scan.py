"""Forward-difference errors of the prescaled squared norm until underflow.

Run with:
    normdiffkit-scan

or:
    python -m normdiffkit.experiments.scaled_scan

Each line is either ``k: <k> n: <n> err <err>``,
``difference underflown for k: <k> n: <n>`` or ``underflow for 10^-<k>``.
"""

from __future__ import annotations

from normdiffkit.scan import ScanConfig, format_record, scan_difference_quotients

GAMMA = 100.0
CAPACITY = 1024


def main() -> None:
    """Prints the full scan trace in double precision."""
    config = ScanConfig(gamma=GAMMA, capacity=CAPACITY)
    for record in scan_difference_quotients(config):
        print(format_record(record))


if __name__ == "__main__":
    main()
