from taskboard.client.console import main

main()
