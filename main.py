import sys

from clusterlens.cli.main import main

if __name__ == '__main__':
    sys.exit(main())
