import sys

from sparse_calc.cli import main

sys.exit(main())
