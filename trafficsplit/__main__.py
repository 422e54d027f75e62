from trafficsplit.cli import main

main()
