import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///coingame.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Board and coin batch
    BOARD_WIDTH = int(os.environ.get('BOARD_WIDTH', '64'))
    BOARD_HEIGHT = int(os.environ.get('BOARD_HEIGHT', '64'))
    NUM_COINS = int(os.environ.get('NUM_COINS', '100'))
    # 'memory' keeps the game in process; 'sql' keeps it in SQLALCHEMY_DATABASE_URI
    GAME_STORE = os.environ.get('GAME_STORE', 'memory')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    PORT = int(os.environ.get('PORT', '3000'))
