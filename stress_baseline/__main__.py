import sys

from stress_baseline.cli import main

if __name__ == "__main__":
    sys.exit(main())
