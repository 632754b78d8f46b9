from dated_logger.main import main

raise SystemExit(main())
