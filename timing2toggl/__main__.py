import sys

from timing2toggl.cli import main

sys.exit(main())
