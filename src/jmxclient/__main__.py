import sys

from jmxclient.cli import main

sys.exit(main())
