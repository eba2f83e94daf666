from syncode._entry import main

main()
