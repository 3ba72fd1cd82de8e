from multicloud import create_app
from multicloud.config import ProductionConfig

app = create_app(ProductionConfig)

if __name__ == '__main__':
    app.run()
