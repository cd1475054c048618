import sys

from radixcalc.shell.repl import main

sys.exit(main())
