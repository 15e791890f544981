import sys

from surfmesh.cli import main

sys.exit(main())
