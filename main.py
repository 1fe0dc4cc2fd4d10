"""Development server for the colour-path API.

Usage
-----
$ pip install -e .
$ python main.py            # starts on http://127.0.0.1:5000

Endpoints
---------
/functions   registered position-function names
/palette     sampled hex colours, e.g.
             /palette?anchors=[[20,0.8,0.4],[200,0.6,0.8]]&steps=9&fnx=arc
/color-at    a single colour at global progress ?t=0..1
"""

from color_path.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=False, threaded=True)
