# run.py
import sys
import uvicorn
from docusafe.utils.logging import api_logger

def main():
    try:
        uvicorn.run(
            "docusafe.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True
        )
    except Exception as e:
        api_logger.critical(f"Error starting the server: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
