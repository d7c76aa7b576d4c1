import sys

from nspatch.cli import main

sys.exit(main())
