from check_pages.cli import main

raise SystemExit(main())
