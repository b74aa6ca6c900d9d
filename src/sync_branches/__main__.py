from sync_branches.cli import main

main()
