from assistant_bot.main import main

main()
