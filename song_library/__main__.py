from song_library.server import main

raise SystemExit(main())
