#!/usr/bin/env python
"""
Convenience script to run DepGraph during development.

Usage:
    python run.py                       # bundled sample graph
    python run.py GRAPH.json --root ID
"""

import sys
import traceback
from pathlib import Path
from datetime import datetime

# Add src to path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

# Log file for crash reports
log_file = Path(__file__).parent / "crash_log.txt"

SAMPLE_ARGS = [str(Path(__file__).parent / "data" / "sample_graph.json"), "--root", "i-0a1b2c3d"]


def main_with_error_handling():
    try:
        from depgraph_app.__main__ import main
        main(sys.argv[1:] or SAMPLE_ARGS)
    except Exception:
        # Write to log file
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"CRASH at {datetime.now()}\n")
            f.write(f"{'='*60}\n")
            f.write(traceback.format_exc())
            f.write("\n")

        # Also print to console
        print("\n" + "="*60)
        print("APPLICATION CRASHED!")
        print("="*60)
        traceback.print_exc()
        print(f"\nError log saved to: {log_file}")
        raise


if __name__ == "__main__":
    main_with_error_handling()
