from gimlet.cli import main

main()
