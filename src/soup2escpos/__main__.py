import sys

from soup2escpos.cli import main

sys.exit(main())
