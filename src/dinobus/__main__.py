from dinobus.main import main

main()
