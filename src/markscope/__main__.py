from markscope.cli import main

main()
