from devsetup.main import main

raise SystemExit(main())
