import sys

from bq_modgen.cli import main

sys.exit(main())
