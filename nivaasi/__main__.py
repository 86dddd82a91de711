from nivaasi.app import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['NIVAASI_ENV'] != 'production', host='0.0.0.0', port=app.config['PORT'])
