import os

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request

from backend import response
from message_formatter import format_message

load_dotenv()

app = Flask(__name__)


@app.route('/')
def index():
    return render_template('index.html')


@app.route('/api/chat', methods=['POST'])
def chat():
    data = request.get_json(silent=True)
    message = data.get('message') if isinstance(data, dict) else None
    if not isinstance(message, str) or not message.strip():
        return jsonify({"reply": "Please send a non-empty message."}), 400

    try:
        ai_response = response(message)
    except Exception:
        app.logger.exception("Reply provider failed")
        return jsonify({"reply": "The assistant is unavailable right now. Please try again later."}), 502

    return jsonify({"reply": ai_response, "html": format_message(ai_response)})


if __name__ == '__main__':
    app.run(port=int(os.getenv("PORT", "5000")), debug=os.getenv("FLASK_DEBUG") == "1")
