from sonarqube_provider.app import main

main()
