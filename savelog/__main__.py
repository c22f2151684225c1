from savelog.cli import main

raise SystemExit(main())
