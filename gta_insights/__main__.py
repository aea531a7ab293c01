import sys

from gta_insights.cli import main

sys.exit(main())
