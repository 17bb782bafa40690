from emotion_painter.cli import main

main()
