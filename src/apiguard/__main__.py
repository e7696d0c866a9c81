from apiguard.app import main

main()
