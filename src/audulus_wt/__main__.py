import sys

from audulus_wt.cli import main

sys.exit(main())
