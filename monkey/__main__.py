from monkey.main import main

main()
