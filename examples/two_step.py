"""
Check that a two-step process finishes: the first step expects a single
follow-up within an hour, the second step reports it.
"""

import sys

from success import expect

if __name__ == "__main__":
    step = sys.argv[1] if len(sys.argv) > 1 else "start"
    if step == "start":
        ok = expect("Import feed").once("1h").email("ops@example.com").send()
    else:
        ok = expect("Import feed").message("import complete").send()
    sys.exit(0 if ok else 1)
