from info_server.main import main

main()
