import sys

from tilebench.cli import main

sys.exit(main())
