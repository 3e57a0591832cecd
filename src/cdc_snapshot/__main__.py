import sys

from cdc_snapshot.cli import main

if __name__ == '__main__':
    sys.exit(main())
