import sys

from ipbot.app import main

sys.exit(main())
