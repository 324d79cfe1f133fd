from compeff_pro.cli.main import main

main()
