import sys

from rawbatch.cli.run_batch import main

sys.exit(main())
