from string_analyzer.main import run

run()
