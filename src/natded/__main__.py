import sys

from natded.main import main

sys.exit(main())
