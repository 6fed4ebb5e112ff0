from portal import create_app, db

app = create_app()

# Ensure tables exist on first run; schema changes go through `flask db upgrade`
with app.app_context():
	db.create_all()

if __name__ == "__main__":
	app.run(host="0.0.0.0", port=8000)
