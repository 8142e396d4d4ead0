from solosphere import create_app

# --- App ---
app = create_app()

# --- Run Server ---
if __name__ == '__main__':
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=app.config.get('DEBUG', False))
