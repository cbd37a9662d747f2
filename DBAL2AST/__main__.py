import sys

from DBAL2AST.cli import main

sys.exit(main())
