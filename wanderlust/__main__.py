from wanderlust.main import run

run()
