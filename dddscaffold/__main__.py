from dddscaffold.cli import main

raise SystemExit(main())
