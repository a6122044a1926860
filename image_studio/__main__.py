from image_studio.main import run

run()
