import sys

from jilox.lox import main

sys.exit(main())
