import sys

from fdleakcheck.cli import main

sys.exit(main())
