from nxt_gen.cli import main

main()
