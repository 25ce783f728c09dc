from gsapi.cli import main

main()
