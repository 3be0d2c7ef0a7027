from ynal.server import main

main()
