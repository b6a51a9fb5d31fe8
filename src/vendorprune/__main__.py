from vendorprune.cli import main

raise SystemExit(main())
