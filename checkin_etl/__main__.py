import sys

from checkin_etl.main import main

sys.exit(main())
