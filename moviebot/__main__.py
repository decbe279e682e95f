from moviebot.main import main

main()
