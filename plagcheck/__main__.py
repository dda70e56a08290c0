from plagcheck.main import main

main()
