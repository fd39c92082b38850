from gocovgui.cli.root import main

main()
