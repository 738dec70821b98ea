# run.py
import logging
from flask.cli import with_appcontext
from shubharambh import create_app, db

app = create_app()
logging.basicConfig(
    level=app.config.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
)


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    print('Database initialized.')


if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
