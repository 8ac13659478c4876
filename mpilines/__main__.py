import sys

from mpilines.cli import main

sys.exit(main())
