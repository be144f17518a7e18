from coingame import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets
    app.logger.info(f"Server listening on port {app.config['PORT']}")
    socketio.run(app, host='0.0.0.0', port=app.config['PORT'])
