from unity_project_version import main

main()
