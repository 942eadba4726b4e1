import os
from toolnav import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('TOOLNAV_PORT', '5000'))
    app.run(host='0.0.0.0', port=port, debug=os.environ.get('TOOLNAV_DEBUG', '0') == '1')
