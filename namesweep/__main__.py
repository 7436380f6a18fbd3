from namesweep.cli import main

main()
