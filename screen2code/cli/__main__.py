import sys

from screen2code.cli import main

sys.exit(main())
