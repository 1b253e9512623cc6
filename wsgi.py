'''
WSGI entry point. Run directly to serve the application on port 8080
'''
from invoicer import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8080)
