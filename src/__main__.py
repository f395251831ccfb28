from src.main import run

run()
