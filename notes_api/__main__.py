from notes_api.app import main

main()
