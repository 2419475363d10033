import sys

from keycalc.cli import main

sys.exit(main())
