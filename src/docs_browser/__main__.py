from docs_browser.cli import main

raise SystemExit(main())
